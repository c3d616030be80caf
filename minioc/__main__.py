"""
命令行入口
Command Line Entry

日期: 2026-10-18
描述: 启动容器并打印扫描到的Bean定义，可选地获取指定Bean，用于检查组件包的装配情况
"""

import argparse
import sys
from typing import List, Optional

from .config import ContainerConfig, load_config
from .context import ApplicationContext
from .exceptions import IoCError
from .logger import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minioc",
        description="Scan component packages and show how the IoC container wires them"
    )
    parser.add_argument(
        "packages",
        nargs="*",
        help="Dotted package names to scan"
    )
    parser.add_argument(
        "--config", "-c",
        help="YAML configuration file with scan_packages"
    )
    parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Do not descend into sub-packages"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip modules that fail to import instead of aborting"
    )
    parser.add_argument(
        "--bean", "-b",
        action="append",
        default=[],
        metavar="NAME",
        help="Resolve this bean after startup (repeatable)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for container output"
    )
    return parser


def _build_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> ContainerConfig:
    packages = list(args.packages)
    recursive = not args.no_recursive
    strict_scan = not args.lenient

    if args.config:
        file_config = load_config(args.config)
        packages = file_config.scan_packages + packages
        recursive = recursive and file_config.recursive
        strict_scan = strict_scan and file_config.strict_scan

    if not packages:
        parser.error("at least one package or --config is required")

    return ContainerConfig(scan_packages=packages, recursive=recursive, strict_scan=strict_scan)


def print_definitions(context: ApplicationContext) -> None:
    """打印Bean定义表"""
    info = context.get_container_info()

    print(f"{'BEAN':<28} {'SCOPE':<10} {'CLASS':<32} DEPENDENCIES")
    for name, bean in info["beans"].items():
        dependencies = ", ".join(bean["dependencies"]) or "-"
        print(f"{name:<28} {bean['scope']:<10} {bean['class']:<32} {dependencies}")

    print(f"\n{info['total_beans']} beans, {info['singletons']} singletons, "
          f"post-processors: {', '.join(info['post_processors']) or '-'}")


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        config = _build_config(parser, args)
        with ApplicationContext(config) as context:
            print_definitions(context)

            for bean_name in args.bean:
                bean = context.get_bean(bean_name)
                print(f"{bean_name} -> {bean!r}")
    except (IoCError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
