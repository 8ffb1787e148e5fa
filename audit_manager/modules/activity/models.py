# Supabase table: activity_log
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, nullable)
- action: text (not null) - e.g. "create", "update", "delete", "status_change"
- entity_type: text (not null) - e.g. "client", "task", "audit"
- entity_id: uuid (nullable)
- details: jsonb (not null, default '{}')
- created_at: timestamp (default: now())
"""
