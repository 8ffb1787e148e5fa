# Supabase Auth
# This module uses Supabase's built-in authentication system
# Identities live in auth.users; the application-level record is the
# profiles row (see modules/profiles/models.py), written right after sign-up.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_session() - Restore the persisted session
- auth.on_auth_state_change() - Session transitions (sign-in, refresh, expiry)
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
- auth.admin.create_user() / delete_user() - service-role only
"""
