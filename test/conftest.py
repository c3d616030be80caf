"""
测试配置文件
Test Configuration File

日期: 2026-10-18
描述: pytest fixtures，负责创建并关闭测试用容器、清理回调记录
"""

from typing import Callable, List

import pytest

from minioc import ApplicationContext, ContainerConfig
from ioc_fixtures import journal


@pytest.fixture(autouse=True)
def clean_journal():
    """每个测试前后清空回调记录"""
    journal.clear()
    yield
    journal.clear()


@pytest.fixture
def make_context() -> Callable[..., ApplicationContext]:
    """
    创建容器的工厂

    测试结束时关闭所有成功创建的容器
    """
    contexts: List[ApplicationContext] = []

    def factory(*packages: str, **options) -> ApplicationContext:
        config = ContainerConfig(scan_packages=list(packages), **options)
        context = ApplicationContext(config)
        contexts.append(context)
        return context

    yield factory

    for context in contexts:
        context.close()
