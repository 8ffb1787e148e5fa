# Demo bootstrap
# Writes with the service-role client; every row has a fixed id (see seed_data.py)

"""
Seeded rows:
- auth user yunus@demo.com with an admin profile
- clients: 2
- form_templates: 3
- tasks: 1 (in_progress, due in 30 days, assigned to the demo user)
- audits: 1 (in_progress, empty form_data)
- checklists: 1 with 4 checklist_items (2 checked)
- folders: 4, one per folder type
"""
