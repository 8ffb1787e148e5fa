# Supabase tables: checklists, checklist_items
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

checklists:
- id: uuid (primary key)
- client_id: uuid (foreign key to clients.id, nullable)
- title: text (not null)
- created_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

checklist_items:
- id: uuid (primary key)
- checklist_id: uuid (foreign key to checklists.id, not null)
- description: text (not null)
- is_checked: boolean (not null, default false)
- checked_by: uuid (foreign key to profiles.id, nullable)
- checked_at: timestamp (nullable)
- order_index: integer (not null)
- created_at: timestamp (default: now())

Progress is derived from the items on every read and never stored.
"""
