"""
订单服务
Order Service

日期: 2026-10-18
描述: 被用户服务依赖的单例组件
"""

import logging
from typing import Dict, List

from minioc import component

logger = logging.getLogger(__name__)


@component("order_service")
class OrderService:
    """订单服务"""

    def __init__(self):
        self._orders: Dict[str, List[str]] = {}

    def place_order(self, user: str, item: str) -> int:
        """
        下单

        Args:
            user: 用户名
            item: 商品

        Returns:
            该用户当前的订单数
        """
        orders = self._orders.setdefault(user, [])
        orders.append(item)
        logger.info(f"Order placed: user={user}, item={item}")
        return len(orders)

    def orders_of(self, user: str) -> List[str]:
        return list(self._orders.get(user, []))
