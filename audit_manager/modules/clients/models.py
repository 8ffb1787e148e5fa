# Supabase table: clients
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- contact_person: text (nullable)
- email: text (nullable)
- phone: text (nullable)
- address: text (nullable)
- created_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now()) - written by the application on update

Tasks, audits, folders, documents and checklists reference clients.id.
No cascade is assumed: deleting a client leaves those rows in place.
"""
