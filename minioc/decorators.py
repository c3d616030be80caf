"""
IoC装饰器实现
IoC Decorators Implementation

日期: 2026-10-18
描述: 提供@component, @scope, autowired, @component_scan等标记，扫描器和容器通过这些标记读取组件元数据
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type, Union

from .bean_definition import InjectionPoint, Scope

logger = logging.getLogger(__name__)

# 类属性名称，只从类自身的__dict__读取，子类不会继承组件身份
_BEAN_NAME_ATTR = "_bean_name"
_BEAN_SCOPE_ATTR = "_bean_scope"
_SCAN_PACKAGES_ATTR = "_scan_packages"


def _default_bean_name(cls: Type) -> str:
    name = cls.__name__
    return name[:1].lower() + name[1:]


def component(name: Union[str, Type, None] = None) -> Any:
    """
    组件装饰器 - 标记可被扫描器发现的类

    Args:
        name: Bean名称，如果不提供则使用首字母小写的类名

    使用示例:
        @component("user_service")
        class UserService:
            order_service = autowired()
    """
    if isinstance(name, type):
        # 不带括号直接使用 @component
        return component()(name)

    if name is not None and (not isinstance(name, str) or not name.strip()):
        raise ValueError(f"Bean name must be a non-empty string, got {name!r}")

    def decorator(cls: Type) -> Type:
        bean_name = name or _default_bean_name(cls)
        setattr(cls, _BEAN_NAME_ATTR, bean_name)
        logger.debug(f"Marked component: {bean_name} ({cls.__qualname__})")
        return cls

    return decorator


def scope(value: Union[str, Scope]) -> Callable[[Type], Type]:
    """
    作用域装饰器

    Args:
        value: "singleton" 或 "prototype"

    使用示例:
        @component("task")
        @scope("prototype")
        class Task:
            pass
    """
    try:
        bean_scope = Scope(value)
    except ValueError:
        raise ValueError(
            f"Unsupported bean scope {value!r}, expected one of "
            f"{[s.value for s in Scope]}"
        ) from None

    def decorator(cls: Type) -> Type:
        setattr(cls, _BEAN_SCOPE_ATTR, bean_scope)
        return cls

    return decorator


class Autowired:
    """
    字段注入标记

    作为类属性声明，容器创建Bean后会把同名Bean直接赋值到实例字段上
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self.field_name: Optional[str] = None
        self.owner: Optional[Type] = None

    def __set_name__(self, owner: Type, field_name: str) -> None:
        self.owner = owner
        self.field_name = field_name

    @property
    def bean_name(self) -> Optional[str]:
        return self.name or self.field_name

    def __get__(self, instance: Any, owner: Type) -> Any:
        if instance is None:
            return self
        # 注入后实例字段会覆盖这个描述符，能走到这里说明还没有注入
        raise AttributeError(
            f"Autowired field '{self.field_name}' of {owner.__name__} has not been injected"
        )

    def __repr__(self) -> str:
        return f"Autowired(field={self.field_name!r}, bean={self.bean_name!r})"


def autowired(name: Optional[str] = None) -> Any:
    """
    自动注入标记 - 用于类属性

    Args:
        name: 依赖的Bean名称，如果不提供则使用字段名

    使用示例:
        @component("user_service")
        class UserService:
            order_service = autowired()
            repo = autowired("player_repository")
    """
    return Autowired(name)


def component_scan(*packages: str) -> Callable[[Type], Type]:
    """
    扫描配置装饰器 - 标记配置类要扫描的包

    使用示例:
        @component_scan("demo.service")
        class AppConfig:
            pass
    """
    if not packages:
        raise ValueError("component_scan requires at least one package")

    def decorator(cls: Type) -> Type:
        setattr(cls, _SCAN_PACKAGES_ATTR, tuple(packages))
        return cls

    return decorator


def is_component(cls: Type) -> bool:
    """检查类自身是否带有组件标记"""
    return _BEAN_NAME_ATTR in vars(cls)


def get_component_name(cls: Type) -> Optional[str]:
    return vars(cls).get(_BEAN_NAME_ATTR)


def get_scope(cls: Type) -> Scope:
    return vars(cls).get(_BEAN_SCOPE_ATTR, Scope.SINGLETON)


def get_scan_packages(cls: Type) -> Tuple[str, ...]:
    return vars(cls).get(_SCAN_PACKAGES_ATTR, ())


def find_injection_points(cls: Type) -> Tuple[InjectionPoint, ...]:
    """
    扫描类的注入点

    沿MRO从基类到子类收集，子类同名字段覆盖基类

    Args:
        cls: 要扫描的类

    Returns:
        注入点元组
    """
    points: Dict[str, InjectionPoint] = {}

    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            if isinstance(attr, Autowired):
                points[attr_name] = InjectionPoint(attr_name, attr.name or attr_name)
            elif attr_name in points:
                # 子类用普通属性覆盖了注入字段
                del points[attr_name]

    return tuple(points.values())
