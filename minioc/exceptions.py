"""
IoC异常定义
IoC Exception Definitions

日期: 2026-10-18
描述: 定义容器扫描、Bean创建和Bean查找相关的异常类
"""

from typing import List


class IoCError(Exception):
    """IoC容器基础异常"""
    pass


class DiscoveryError(IoCError):
    """组件扫描异常"""

    def __init__(self, base_package: str, reason: str):
        self.base_package = base_package
        self.reason = reason
        super().__init__(f"Failed to scan package '{base_package}': {reason}")


class BeanCreationError(IoCError):
    """Bean创建异常"""

    def __init__(self, bean_name: str, reason: str):
        self.bean_name = bean_name
        self.reason = reason
        super().__init__(f"Error creating bean '{bean_name}': {reason}")


class InstantiationError(BeanCreationError):
    """Bean实例化异常（无参构造失败）"""
    pass


class DependencyResolutionError(BeanCreationError):
    """依赖解析异常"""

    def __init__(self, bean_name: str, dependency_name: str, reason: str = ""):
        self.dependency_name = dependency_name
        message = f"failed to resolve dependency '{dependency_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(bean_name, message)


class CircularDependencyError(BeanCreationError):
    """循环依赖异常"""

    def __init__(self, chain: List[str]):
        self.chain = list(chain)
        chain_str = " -> ".join(self.chain)
        super().__init__(self.chain[0], f"circular dependency detected: {chain_str}")


class NoSuchBeanError(IoCError):
    """Bean未找到异常"""

    def __init__(self, bean_name: str):
        self.bean_name = bean_name
        super().__init__(f"No bean named '{bean_name}' is defined")


class InitializationCallbackError(IoCError):
    """初始化回调异常，只记录日志，不中断Bean创建"""

    def __init__(self, bean_name: str, reason: str):
        self.bean_name = bean_name
        self.reason = reason
        super().__init__(f"Initialization callback of bean '{bean_name}' failed: {reason}")


class ContainerError(IoCError):
    """容器异常"""
    pass
