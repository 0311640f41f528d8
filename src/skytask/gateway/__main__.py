"""python -m skytask.gateway -- 启动 uvicorn"""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "skytask.gateway.main:app",
        host=os.environ.get("SKYTASK_HOST", "127.0.0.1"),
        port=int(os.environ.get("SKYTASK_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
