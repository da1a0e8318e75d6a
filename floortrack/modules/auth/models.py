# Supabase Auth + users table
# Identity (passwords, tokens, verification mail) lives in Supabase Auth.
# The users table links each identity account to a role and groups.

"""
Supabase Auth provides:
- auth.sign_up() - Register new identity accounts (sends verification mail)
- auth.sign_in_with_password() - Authenticate and issue a JWT
- auth.get_user() - Verify a JWT and return its user
- auth.sign_out() - Logout
- auth.reset_password_for_email() - Send a password reset mail
- auth.admin.delete_user() - Delete an identity account (service role key)

Expected table structure:

users:
- id: bigint (primary key)
- auth_uid: text (unique, not null) - Supabase Auth user id
- email: text (not null)
- first_name: text (nullable)
- last_name: text (nullable)
- role_id: bigint (foreign key to roles.id, nullable)
- created_at: timestamp (default: now())
"""
