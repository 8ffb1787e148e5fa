# Supabase table: tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- client_id: uuid (foreign key to clients.id, nullable)
- status: text (not null, 'pending' | 'in_progress' | 'completed', default 'pending')
- assigned_to: uuid[] (nullable) - profile ids
- created_by: uuid (foreign key to profiles.id, nullable)
- due_date: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
