"""
示例配置类
Demo Configuration

日期: 2026-10-18
描述: 声明容器要扫描的组件包
"""

from minioc import component_scan


@component_scan("demo.service")
class AppConfig:
    """示例应用配置"""
    pass
