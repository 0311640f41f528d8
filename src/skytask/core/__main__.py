"""CLI 入口模块 -- python -m skytask.core <command>

支持的命令：
  init-db  在配置的路径上初始化 SQLite 数据库
"""

import asyncio
import sys

from .config import get_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m skytask.core <command>")
        print("命令:")
        print("  init-db  在配置的路径上初始化 SQLite 数据库")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db")
        sys.exit(1)


async def init_database() -> None:
    """创建 SQLite 表结构（已存在时不变）"""
    from .store import create_repository

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    repository = await create_repository("sqlite", db_path)
    try:
        await repository.ping()
        print("初始化完成")
    finally:
        await repository.close()


if __name__ == "__main__":
    main()
