"""
Bean生命周期接口
Bean Lifecycle Interfaces

日期: 2026-10-18
描述: 组件可以选择实现的回调接口，容器在创建和销毁Bean时按固定顺序调用
"""

from abc import ABC, abstractmethod
from typing import Any


class BeanNameAware(ABC):
    """需要知道自身注册名称的Bean"""

    @abstractmethod
    def set_bean_name(self, name: str) -> None:
        """
        注入完成后回调，传入Bean在容器中的名称

        Args:
            name: Bean名称
        """


class InitializingBean(ABC):
    """需要在属性注入完成后执行初始化逻辑的Bean"""

    @abstractmethod
    def after_properties_set(self) -> None:
        """
        自定义初始化逻辑

        抛出的异常会被容器记录日志，不会中断Bean创建
        """


class DisposableBean(ABC):
    """容器关闭时需要释放资源的单例Bean"""

    @abstractmethod
    def destroy(self) -> None:
        """自定义清理逻辑"""


class BeanPostProcessor(ABC):
    """
    Bean后置处理器

    在扫描阶段实例化，此后每个Bean创建时都会经过它的两个钩子。
    钩子可以返回另一个对象替换原Bean（例如代理），返回None表示不替换
    """

    def post_process_before_initialization(self, bean: Any, bean_name: str) -> Any:
        """
        初始化回调之前调用

        Args:
            bean: 当前Bean实例
            bean_name: Bean名称

        Returns:
            交给下一个处理器的实例
        """
        return bean

    def post_process_after_initialization(self, bean: Any, bean_name: str) -> Any:
        """
        初始化回调之后调用，代理替换在这里完成

        Args:
            bean: 当前Bean实例
            bean_name: Bean名称

        Returns:
            交给下一个处理器的实例
        """
        return bean
