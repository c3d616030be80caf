"""
IoC容器框架
IoC Container Framework

日期: 2026-10-18
描述: 扫描组件包，管理单例和原型Bean，提供字段注入、生命周期回调和Bean后置处理器
"""

from .decorators import autowired, component, component_scan, scope, Autowired
from .lifecycle import BeanNameAware, BeanPostProcessor, DisposableBean, InitializingBean
from .bean_definition import BeanDefinition, BeanDefinitionRegistry, InjectionPoint, Scope
from .scanner import ComponentScanner
from .config import ContainerConfig, load_config
from .context import ApplicationContext
from .exceptions import (
    IoCError, DiscoveryError, BeanCreationError, InstantiationError,
    DependencyResolutionError, CircularDependencyError, NoSuchBeanError,
    InitializationCallbackError, ContainerError
)

__version__ = "0.1.0"

__all__ = [
    # 标记
    'component',
    'scope',
    'autowired',
    'component_scan',
    'Autowired',

    # 生命周期接口
    'BeanNameAware',
    'InitializingBean',
    'DisposableBean',
    'BeanPostProcessor',

    # 核心类
    'BeanDefinition',
    'BeanDefinitionRegistry',
    'InjectionPoint',
    'Scope',
    'ComponentScanner',
    'ContainerConfig',
    'load_config',
    'ApplicationContext',

    # 异常
    'IoCError',
    'DiscoveryError',
    'BeanCreationError',
    'InstantiationError',
    'DependencyResolutionError',
    'CircularDependencyError',
    'NoSuchBeanError',
    'InitializationCallbackError',
    'ContainerError',
]
