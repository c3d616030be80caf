"""
容器配置
Container Configuration

日期: 2026-10-18
描述: 容器启动时使用的配置描述，可由@component_scan配置类或YAML文件生成
"""

import logging
import re
from pathlib import Path
from typing import Any, List, Type, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .decorators import get_scan_packages
from .exceptions import DiscoveryError

logger = logging.getLogger(__name__)

_DOTTED_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class ContainerConfig(BaseModel):
    """容器配置"""

    model_config = ConfigDict(
        # 禁止额外字段
        extra="forbid",
        # 允许属性验证
        validate_assignment=True
    )

    scan_packages: List[str] = Field(min_length=1, description="要扫描的包，点分隔")
    recursive: bool = Field(default=True, description="是否递归扫描子包")
    strict_scan: bool = Field(default=True, description="模块导入失败时是否中断启动")

    @field_validator("scan_packages")
    @classmethod
    def check_package_names(cls, value: List[str]) -> List[str]:
        names = [name.strip() for name in value]
        for name in names:
            if not _DOTTED_NAME.match(name):
                raise ValueError(f"invalid package name: {name!r}")
        return names

    @classmethod
    def from_config_class(cls, config_class: Type) -> "ContainerConfig":
        """
        从@component_scan配置类生成配置

        Args:
            config_class: 配置类

        Returns:
            容器配置

        Raises:
            DiscoveryError: 配置类没有扫描标记
        """
        packages = get_scan_packages(config_class)
        if not packages:
            raise DiscoveryError(
                config_class.__qualname__,
                "configuration class is not annotated with @component_scan"
            )
        return cls(scan_packages=list(packages))


def load_config(path: Union[str, Path]) -> ContainerConfig:
    """
    从YAML文件加载配置

    文件格式:
        scan_packages:
          - demo.service
        recursive: true
        strict_scan: true

    Args:
        path: YAML文件路径

    Returns:
        容器配置

    Raises:
        ValueError: 文件不是合法的YAML或内容不是映射
    """
    config_path = Path(path)
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            data: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Configuration file {config_path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")

    config = ContainerConfig(**data)
    logger.info(f"Loaded container configuration from {config_path}: {config.scan_packages}")
    return config


def resolve_config(config: Union[ContainerConfig, Type]) -> ContainerConfig:
    """把容器接受的各种配置形式统一成ContainerConfig"""
    if isinstance(config, ContainerConfig):
        return config
    if isinstance(config, type):
        return ContainerConfig.from_config_class(config)
    raise TypeError(
        f"Expected ContainerConfig or a @component_scan class, got {type(config).__name__}"
    )
