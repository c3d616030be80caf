"""
Bean定义与注册表
Bean Definition and Registry

日期: 2026-10-18
描述: 描述如何创建一个Bean的元数据（类型、作用域、注入点），以及按名称保存这些元数据的注册表
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from .exceptions import NoSuchBeanError

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    """Bean作用域"""

    SINGLETON = "singleton"
    PROTOTYPE = "prototype"


@dataclass(frozen=True)
class InjectionPoint:
    """字段注入点：字段名 -> 被注入的Bean名称"""

    field_name: str
    bean_name: str


@dataclass(frozen=True)
class BeanDefinition:
    """
    Bean定义

    扫描时为每个组件类创建一次，创建后不可变

    Attributes:
        bean_name: 注册的Bean名称
        bean_class: 组件类
        scope: 作用域，默认单例
        injection_points: 需要注入的字段
        is_post_processor: 该类是否同时是Bean后置处理器
    """

    bean_name: str
    bean_class: type
    scope: Scope = Scope.SINGLETON
    injection_points: Tuple[InjectionPoint, ...] = ()
    is_post_processor: bool = False

    @property
    def is_singleton(self) -> bool:
        return self.scope == Scope.SINGLETON

    @property
    def is_prototype(self) -> bool:
        return self.scope == Scope.PROTOTYPE

    @property
    def dependency_names(self) -> List[str]:
        return [point.bean_name for point in self.injection_points]

    def __str__(self) -> str:
        return (f"BeanDefinition(name={self.bean_name}, "
                f"class={self.bean_class.__qualname__}, scope={Scope(self.scope).value})")


class BeanDefinitionRegistry:
    """
    Bean定义注册表

    名称唯一，同名注册会覆盖之前的定义
    """

    def __init__(self):
        self._definitions: Dict[str, BeanDefinition] = {}

    def register(self, definition: BeanDefinition) -> None:
        """
        注册Bean定义

        Args:
            definition: Bean定义
        """
        previous = self._definitions.get(definition.bean_name)
        if previous is not None and previous.bean_class is not definition.bean_class:
            logger.warning(
                f"Overriding bean definition '{definition.bean_name}': "
                f"{previous.bean_class.__qualname__} -> {definition.bean_class.__qualname__}",
                extra={"bean_name": definition.bean_name}
            )
        self._definitions[definition.bean_name] = definition
        logger.debug(f"Registered bean definition: {definition}")

    def get(self, bean_name: str) -> BeanDefinition:
        """
        获取Bean定义

        Args:
            bean_name: Bean名称

        Returns:
            Bean定义

        Raises:
            NoSuchBeanError: 名称未注册
        """
        try:
            return self._definitions[bean_name]
        except KeyError:
            raise NoSuchBeanError(bean_name) from None

    def contains(self, bean_name: str) -> bool:
        return bean_name in self._definitions

    def names(self) -> List[str]:
        return list(self._definitions)

    def items(self) -> List[Tuple[str, BeanDefinition]]:
        return list(self._definitions.items())

    def __contains__(self, bean_name: object) -> bool:
        return bean_name in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._definitions))

    def __len__(self) -> int:
        return len(self._definitions)
