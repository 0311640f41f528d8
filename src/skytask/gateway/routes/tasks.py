"""任务路由

GET /api/tasks?userId=N: 查询用户的全部任务。
POST /api/tasks: 创建任务。
DELETE /api/tasks/{task_id}: 删除任务（不存在时同样返回 204）。
GET /api/tasks/stats/{user_id}: 查询用户任务的聚合统计。
"""

from fastapi import APIRouter, Depends, Query
from skytask.core.models import TaskInput
from starlette.responses import JSONResponse, Response

from ..deps import get_task_service
from ..services.task_service import TaskService
from .params import parse_id

router = APIRouter()


@router.get("/api/tasks")
async def list_tasks(
    user_id: str | None = Query(default=None, alias="userId", description="任务所属用户 ID"),
    service: TaskService = Depends(get_task_service),
):
    """查询任务列表，按创建顺序"""
    owner_id = parse_id(user_id, "userId")
    tasks = await service.list_tasks(owner_id)
    return JSONResponse(status_code=200, content=[t.to_wire() for t in tasks])


@router.post("/api/tasks")
async def create_task(
    body: TaskInput,
    service: TaskService = Depends(get_task_service),
):
    """创建任务，id 与 createdAt 由服务端分配"""
    task = await service.create_task(body)
    return JSONResponse(status_code=201, content=task.to_wire())


@router.get("/api/tasks/stats/{user_id}")
async def get_task_stats(
    user_id: str,
    service: TaskService = Depends(get_task_service),
):
    """查询任务统计"""
    owner_id = parse_id(user_id, "userId")
    stats = await service.get_stats(owner_id)
    return JSONResponse(status_code=200, content=stats.to_wire())


@router.delete("/api/tasks/{task_id}")
async def delete_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """删除任务（幂等）"""
    await service.delete_task(parse_id(task_id, "task ID"))
    return Response(status_code=204)
