from audit_manager.config.settings import settings, Settings

__all__ = ["settings", "Settings"]
