import asyncio
from collections import Counter
from supabase import Client
from audit_manager.database.repository import TableRepository
from audit_manager.modules.dashboard.schemas import DashboardStats, TaskStats, AuditStats
from audit_manager.core.enums import TaskStatus, AuditStatus


class DashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def get_stats(self) -> DashboardStats:
        """Four independent reads issued together"""
        clients, tasks, audits, users = await asyncio.gather(
            TableRepository(self.supabase, "clients").count(),
            TableRepository(self.supabase, "tasks").query(columns="status", order=None),
            TableRepository(self.supabase, "audits").query(columns="status", order=None),
            TableRepository(self.supabase, "profiles").count(),
        )
        task_counts = Counter(row.get("status") for row in tasks)
        audit_counts = Counter(row.get("status") for row in audits)
        return DashboardStats(
            clients=clients,
            users=users,
            tasks=TaskStats(
                total=len(tasks),
                **{s.value: task_counts.get(s.value, 0) for s in TaskStatus},
            ),
            audits=AuditStats(
                total=len(audits),
                **{s.value: audit_counts.get(s.value, 0) for s in AuditStatus},
            ),
        )
