"""
IoC应用上下文
IoC Application Context

日期: 2026-10-18
描述: 容器核心实现，负责扫描组件、创建单例池、按作用域创建Bean、字段注入以及执行生命周期回调和后置处理器
"""

import logging
import threading
from typing import Any, Dict, List, Tuple, Type, TypeVar, Union

from .bean_definition import BeanDefinition, BeanDefinitionRegistry
from .config import ContainerConfig, resolve_config
from .exceptions import (
    BeanCreationError, CircularDependencyError, ContainerError,
    DependencyResolutionError, InitializationCallbackError,
    InstantiationError, IoCError, NoSuchBeanError
)
from .lifecycle import BeanNameAware, BeanPostProcessor, DisposableBean, InitializingBean
from .scanner import ComponentScanner

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApplicationContext:
    """
    IoC应用上下文

    构造时扫描配置的包并提前创建所有单例Bean；原型Bean在每次get_bean时创建
    """

    def __init__(self, config: Union[ContainerConfig, Type]):
        """
        初始化容器

        Args:
            config: 容器配置，或带@component_scan标记的配置类
        """
        self.config = resolve_config(config)
        self.registry = BeanDefinitionRegistry()
        self._singleton_objects: Dict[str, Any] = {}  # 单例池
        self._singleton_order: List[str] = []
        self._bean_post_processors: List[BeanPostProcessor] = []
        self._lock = threading.RLock()
        self._local = threading.local()
        self._closed = False

        self.scanner = ComponentScanner(
            self.registry,
            self._bean_post_processors,
            recursive=self.config.recursive,
            strict=self.config.strict_scan
        )

        self._refresh()

    def _refresh(self) -> None:
        logger.info("Initializing IoC container...")

        try:
            for package in self.config.scan_packages:
                self.scanner.scan(package)
            logger.info(
                f"Discovered {len(self.registry)} bean definitions and "
                f"{len(self._bean_post_processors)} post-processors"
            )

            self._preinstantiate_singletons()
        except IoCError as e:
            logger.error(f"Failed to initialize IoC container: {e}")
            raise

        logger.info(f"IoC container initialized successfully with {len(self._singleton_objects)} singletons")

    def _preinstantiate_singletons(self) -> None:
        """按注册顺序创建所有单例Bean，后置处理器也走完整创建流程"""
        for bean_name, definition in self.registry.items():
            if not definition.is_singleton or bean_name in self._singleton_objects:
                continue

            self._get_singleton(bean_name, definition)

    def get_bean(self, name: str) -> Any:
        """
        获取Bean实例

        Args:
            name: Bean名称

        Returns:
            单例返回池中的实例，原型每次创建新实例

        Raises:
            NoSuchBeanError: 名称未注册
        """
        if self._closed:
            raise ContainerError("Application context has been closed")

        definition = self.registry.get(name)
        if definition.is_singleton:
            return self._get_singleton(name, definition)
        return self.create_bean(name, definition)

    def _get_singleton(self, name: str, definition: BeanDefinition) -> Any:
        instance = self._singleton_objects.get(name)
        if instance is not None:
            return instance

        with self._lock:
            if name in self._singleton_objects:
                return self._singleton_objects[name]

            instance = self.create_bean(name, definition)
            self._add_singleton(name, instance)
            return self._singleton_objects[name]

    def _add_singleton(self, name: str, instance: Any) -> None:
        with self._lock:
            if name not in self._singleton_objects:
                self._singleton_objects[name] = instance
                self._singleton_order.append(name)

    def create_bean(self, name: str, definition: BeanDefinition) -> Any:
        """
        按固定顺序创建Bean：
        实例化 -> 字段注入 -> 名称回调 -> 初始化前处理 -> 初始化回调 -> 初始化后处理

        Args:
            name: Bean名称
            definition: Bean定义

        Returns:
            最终实例，可能已被后置处理器替换
        """
        creating = self._creation_chain()
        if name in creating:
            raise CircularDependencyError(creating[creating.index(name):] + [name])

        creating.append(name)
        try:
            logger.debug(f"Creating bean instance: {name}", extra={"bean_name": name})

            # 1. 实例化
            instance = self._instantiate(name, definition)

            # 2. 注入依赖
            self._populate_bean(name, definition, instance)

            # 3. 名称回调
            if isinstance(instance, BeanNameAware):
                instance.set_bean_name(name)

            # 4. 初始化前的后置处理器
            instance = self._apply_post_processors(instance, name, before=True)

            # 5. 初始化，失败只记录日志
            self._invoke_init_callback(name, instance)

            # 6. 初始化后的后置处理器，代理替换在这一步完成
            instance = self._apply_post_processors(instance, name, before=False)

            logger.debug(f"Bean instance created successfully: {name}", extra={"bean_name": name})
            return instance
        finally:
            creating.pop()

    def _creation_chain(self) -> List[str]:
        chain = getattr(self._local, "creating", None)
        if chain is None:
            chain = self._local.creating = []
        return chain

    def _instantiate(self, name: str, definition: BeanDefinition) -> Any:
        try:
            return definition.bean_class()
        except Exception as e:
            raise InstantiationError(
                name, f"cannot construct {definition.bean_class.__qualname__}: {e}"
            ) from e

    def _populate_bean(self, name: str, definition: BeanDefinition, instance: Any) -> None:
        for point in definition.injection_points:
            try:
                dependency = self.get_bean(point.bean_name)
            except NoSuchBeanError as e:
                raise DependencyResolutionError(name, point.bean_name, str(e)) from e

            try:
                setattr(instance, point.field_name, dependency)
            except AttributeError as e:
                raise DependencyResolutionError(
                    name, point.bean_name, f"cannot assign field '{point.field_name}': {e}"
                ) from e

            logger.debug(
                f"Injected dependency {point.bean_name} into {name}.{point.field_name}",
                extra={"bean_name": name}
            )

    def _apply_post_processors(self, instance: Any, name: str, before: bool) -> Any:
        phase = "before" if before else "after"
        result = instance

        for processor in self._bean_post_processors:
            try:
                if before:
                    current = processor.post_process_before_initialization(result, name)
                else:
                    current = processor.post_process_after_initialization(result, name)
            except Exception as e:
                raise BeanCreationError(
                    name, f"post-processor {type(processor).__qualname__} failed {phase} initialization: {e}"
                ) from e

            if current is None:
                continue
            if current is not result:
                logger.debug(
                    f"Bean {name} replaced by {type(processor).__qualname__} {phase} initialization",
                    extra={"bean_name": name}
                )
            result = current

        return result

    def _invoke_init_callback(self, name: str, instance: Any) -> None:
        if not isinstance(instance, InitializingBean):
            return

        try:
            instance.after_properties_set()
        except Exception as e:
            error = InitializationCallbackError(name, str(e))
            logger.error(str(error), exc_info=True, extra={"bean_name": name})

    def contains_bean(self, name: str) -> bool:
        """
        检查是否存在指定Bean定义

        Args:
            name: Bean名称

        Returns:
            是否存在
        """
        return name in self.registry

    def __contains__(self, name: object) -> bool:
        return name in self.registry

    def get_bean_definition(self, name: str) -> BeanDefinition:
        return self.registry.get(name)

    def get_bean_definition_names(self) -> List[str]:
        return self.registry.names()

    def get_beans_of_type(self, bean_type: Type[T]) -> Dict[str, T]:
        """
        按类型获取已创建的单例

        Args:
            bean_type: 类型

        Returns:
            名称到实例的字典
        """
        return {
            name: instance
            for name, instance in self._singleton_objects.items()
            if isinstance(instance, bean_type)
        }

    @property
    def bean_post_processors(self) -> Tuple[BeanPostProcessor, ...]:
        return tuple(self._bean_post_processors)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """关闭容器，按创建的相反顺序调用单例的destroy"""
        if self._closed:
            return

        logger.info("Shutting down IoC container...")

        for name in reversed(self._singleton_order):
            instance = self._singleton_objects[name]
            if not isinstance(instance, DisposableBean):
                continue
            try:
                instance.destroy()
                logger.debug(f"Bean destroyed: {name}", extra={"bean_name": name})
            except Exception as e:
                logger.error(f"Error destroying bean {name}: {e}", exc_info=True, extra={"bean_name": name})

        self._closed = True
        logger.info("IoC container shutdown completed")

    def __enter__(self) -> "ApplicationContext":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def get_container_info(self) -> dict:
        """
        获取容器信息

        Returns:
            容器状态信息
        """
        return {
            "closed": self._closed,
            "scan_packages": list(self.config.scan_packages),
            "total_beans": len(self.registry),
            "singletons": len(self._singleton_objects),
            "post_processors": [type(p).__qualname__ for p in self._bean_post_processors],
            "beans": {
                name: {
                    "class": definition.bean_class.__qualname__,
                    "scope": definition.scope.value,
                    "dependencies": definition.dependency_names,
                    "initialized": name in self._singleton_objects
                }
                for name, definition in self.registry.items()
            }
        }

    def __repr__(self) -> str:
        return (f"ApplicationContext(packages={self.config.scan_packages}, "
                f"beans={len(self.registry)}, singletons={len(self._singleton_objects)})")
