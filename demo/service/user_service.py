"""
用户服务
User Service

日期: 2026-10-18
描述: 注入订单服务，实现名称回调和初始化回调；容器返回的是后置处理器生成的代理
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from minioc import BeanNameAware, InitializingBean, autowired, component

logger = logging.getLogger(__name__)


class UserService(ABC):
    """用户服务接口"""

    @abstractmethod
    def test(self) -> str:
        pass

    @abstractmethod
    def buy(self, item: str) -> int:
        pass


@component("user_service")
class UserServiceImpl(UserService, BeanNameAware, InitializingBean):
    """用户服务实现"""

    order_service = autowired()

    def __init__(self):
        self.bean_name: Optional[str] = None
        self.name = "anonymous"
        self.ready = False

    def set_bean_name(self, name: str) -> None:
        self.bean_name = name

    def after_properties_set(self) -> None:
        self.ready = True
        logger.info(f"{self.bean_name} initialized")

    def test(self) -> str:
        return f"{self.bean_name}: user={self.name}, order_service={type(self.order_service).__name__}"

    def buy(self, item: str) -> int:
        return self.order_service.place_order(self.name, item)
