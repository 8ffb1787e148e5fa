# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (not null)
- full_name: text (not null)
- role: text (not null, 'admin' | 'team', default 'team')
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Rows are inserted by application code right after sign-up; the store does
not create them. A session whose identity has no row here gets no profile.
"""
