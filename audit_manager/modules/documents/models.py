# Supabase tables: folders, documents
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

folders:
- id: uuid (primary key)
- client_id: uuid (foreign key to clients.id, nullable)
- name: text (not null)
- folder_type: text (not null, 'meeting_notes' | 'working_papers' | 'contracts' | 'evidence')
- parent_id: uuid (foreign key to folders.id, nullable)
- created_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())

documents:
- id: uuid (primary key)
- folder_id: uuid (foreign key to folders.id, nullable)
- client_id: uuid (foreign key to clients.id, nullable)
- name: text (not null)
- file_path: text (not null) - storage path; files are uploaded out of band
- file_type: text (not null)
- file_size: bigint (not null)
- uploaded_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())
"""
