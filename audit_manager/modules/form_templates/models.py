# Supabase table: form_templates
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- template_type: text (not null) - e.g. financial_audit, compliance_audit,
  internal_audit, quality_audit, information_systems_audit, custom
- content: jsonb (not null, default '{}') - {"sections": [{"title": ..., "fields": [...]}]}
- created_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
