"""
组件扫描器
Component Scanner

日期: 2026-10-18
描述: 导入指定包下的所有模块，查找带@component标记的类，生成Bean定义并提前实例化Bean后置处理器
"""

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Iterator, List, Optional, Set, Type

from .bean_definition import BeanDefinition, BeanDefinitionRegistry
from .decorators import find_injection_points, get_component_name, get_scope, is_component
from .exceptions import DiscoveryError
from .lifecycle import BeanPostProcessor

logger = logging.getLogger(__name__)


class ComponentScanner:
    """
    组件扫描器

    负责扫描指定包下的Python模块，把组件类登记到注册表。
    后置处理器必须先于普通Bean存在，所以在扫描时直接无参实例化；
    这个实例只用于处理器列表，单例池中的同名Bean仍按完整创建流程生成
    """

    def __init__(
        self,
        registry: BeanDefinitionRegistry,
        post_processors: Optional[List[BeanPostProcessor]] = None,
        recursive: bool = True,
        strict: bool = True
    ):
        """
        初始化扫描器

        Args:
            registry: Bean定义注册表
            post_processors: 后置处理器列表，发现的处理器按顺序追加到这里
            recursive: 是否递归扫描子包
            strict: 模块导入失败时是否中断扫描
        """
        self.registry = registry
        self.post_processors = post_processors if post_processors is not None else []
        self.recursive = recursive
        self.strict = strict
        self.scanned_modules: Set[str] = set()

    def scan(self, base_package: str) -> int:
        """
        扫描包

        Args:
            base_package: 点分隔的包名，也可以是单个模块

        Returns:
            本次登记的组件数量

        Raises:
            DiscoveryError: 包无法导入、模块导入失败（严格模式）或后置处理器无法实例化
        """
        logger.info(f"Starting component scan on package: {base_package}", extra={"package": base_package})

        try:
            root = importlib.import_module(base_package)
        except Exception as e:
            raise DiscoveryError(base_package, f"cannot import package: {e}") from e

        found = 0
        for module in self._walk(base_package, root):
            found += self._scan_module(base_package, module)

        logger.info(
            f"Component scan of '{base_package}' completed. Found {found} components",
            extra={"package": base_package}
        )
        return found

    def _walk(self, base_package: str, module: ModuleType) -> Iterator[ModuleType]:
        """
        按名称顺序遍历包下的模块

        Args:
            base_package: 扫描入口，用于错误信息
            module: 当前模块或包
        """
        yield module

        path = getattr(module, "__path__", None)
        if path is None:
            return

        children = sorted(pkgutil.iter_modules(path, prefix=module.__name__ + "."), key=lambda m: m.name)
        for child in children:
            if child.name.rpartition(".")[2].startswith("_"):
                continue
            if child.ispkg and not self.recursive:
                continue

            child_module = self._import_module(base_package, child.name)
            if child_module is None:
                continue

            if child.ispkg:
                yield from self._walk(base_package, child_module)
            else:
                yield child_module

    def _import_module(self, base_package: str, module_name: str) -> Optional[ModuleType]:
        try:
            module = importlib.import_module(module_name)
            logger.debug(f"Successfully imported module: {module_name}")
            return module
        except Exception as e:
            if self.strict:
                raise DiscoveryError(base_package, f"cannot import module '{module_name}': {e}") from e
            logger.error(
                f"Skipping module {module_name} that failed to import: {e}",
                exc_info=True, extra={"package": base_package}
            )
            return None

    def _scan_module(self, base_package: str, module: ModuleType) -> int:
        """
        扫描模块中的类

        Args:
            base_package: 扫描入口
            module: 已导入的模块

        Returns:
            登记的组件数量
        """
        if module.__name__ in self.scanned_modules:
            return 0
        self.scanned_modules.add(module.__name__)

        found = 0
        # vars()保持定义顺序
        for obj in list(vars(module).values()):
            # 只处理在当前模块中定义的类
            if not inspect.isclass(obj) or obj.__module__ != module.__name__:
                continue
            if not is_component(obj):
                continue

            self._register_component(base_package, obj)
            found += 1

        return found

    def _register_component(self, base_package: str, cls: Type) -> None:
        bean_name = get_component_name(cls)
        injection_points = find_injection_points(cls)
        is_post_processor = issubclass(cls, BeanPostProcessor)

        if is_post_processor:
            try:
                processor = cls()
            except Exception as e:
                raise DiscoveryError(
                    base_package,
                    f"cannot instantiate post-processor '{bean_name}' ({cls.__qualname__}): {e}"
                ) from e

            self.post_processors.append(processor)
            logger.debug(f"Registered bean post-processor: {bean_name}", extra={"bean_name": bean_name})

        definition = BeanDefinition(
            bean_name=bean_name,
            bean_class=cls,
            scope=get_scope(cls),
            injection_points=injection_points,
            is_post_processor=is_post_processor
        )
        self.registry.register(definition)
