"""
代理后置处理器
Proxy Post-Processor

日期: 2026-10-18
描述: 初始化后把user_service替换成记录方法调用的代理对象
"""

import functools
import logging
from typing import Any, List

from minioc import BeanPostProcessor, component

logger = logging.getLogger(__name__)

PROXIED_BEANS = {"user_service"}


class LoggingProxy:
    """方法调用前记录日志，再委托给目标对象"""

    def __init__(self, target: Any, bean_name: str):
        self._target = target
        self._bean_name = bean_name
        self.calls: List[str] = []

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._target, name)
        if not callable(attr):
            return attr

        @functools.wraps(attr)
        def invoke(*args, **kwargs):
            # 切点：所有公开方法
            self.calls.append(name)
            logger.info(f"proxy logic: {self._bean_name}.{name}")
            return attr(*args, **kwargs)

        return invoke

    @property
    def target(self) -> Any:
        return self._target

    def __repr__(self) -> str:
        return f"LoggingProxy({self._bean_name} -> {type(self._target).__name__})"


@component("proxy_post_processor")
class ProxyPostProcessor(BeanPostProcessor):
    """为指定Bean生成代理"""

    def post_process_after_initialization(self, bean: Any, bean_name: str) -> Any:
        if bean_name in PROXIED_BEANS:
            return LoggingProxy(bean, bean_name)
        return bean
