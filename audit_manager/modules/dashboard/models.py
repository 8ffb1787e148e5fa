# Dashboard
# No table of its own; reads clients, profiles, tasks and audits

"""
Figures returned by /dashboard/stats:
- clients: count of clients rows
- users: count of profiles rows
- tasks: total plus one count per task status (pending, in_progress, completed)
- audits: total plus one count per audit status (draft, in_progress, completed)
"""
