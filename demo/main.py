"""
示例入口
Demo Entry

日期: 2026-10-18
描述: 启动容器，获取用户服务并调用，运行方式: python -m demo.main
"""

import sys

from minioc import ApplicationContext
from minioc.logger import setup_logging

from .app_config import AppConfig


def main() -> int:
    """主函数"""
    setup_logging("INFO")
    setup_logging("INFO", logger_name="demo")

    with ApplicationContext(AppConfig) as context:
        user_service = context.get_bean("user_service")  # 代理对象
        print(user_service.test())
        print(f"orders: {user_service.buy('sword')}")
        print(repr(user_service))

    return 0


if __name__ == "__main__":
    sys.exit(main())
