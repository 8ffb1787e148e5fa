# Supabase table: audits
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- client_id: uuid (foreign key to clients.id, nullable)
- task_id: uuid (foreign key to tasks.id, nullable)
- form_template_id: uuid (foreign key to form_templates.id, nullable)
- status: text (not null, 'draft' | 'in_progress' | 'completed', default 'draft')
- form_data: jsonb (not null, default '{}') - answers keyed by template field
- created_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
