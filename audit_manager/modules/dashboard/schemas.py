from pydantic import BaseModel


class TaskStats(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0


class AuditStats(BaseModel):
    total: int = 0
    draft: int = 0
    in_progress: int = 0
    completed: int = 0


class DashboardStats(BaseModel):
    clients: int = 0
    users: int = 0
    tasks: TaskStats = TaskStats()
    audits: AuditStats = AuditStats()
