from typing import Any

from minioc import BeanPostProcessor, component

from ioc_fixtures import journal


@component("second_processor")
class SecondProcessor(BeanPostProcessor):

    def post_process_before_initialization(self, bean: Any, bean_name: str) -> Any:
        journal.record("second", "before", bean_name, type(bean).__name__)
        return None

    def post_process_after_initialization(self, bean: Any, bean_name: str) -> Any:
        journal.record("second", "after", bean_name, type(bean).__name__)
        return bean
