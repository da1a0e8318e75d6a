# Supabase tables: users, user_groups
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

users:
- id: bigint (primary key)
- auth_uid: text (not null, unique) - Supabase Auth user id
- email: text (not null)
- first_name: text (nullable)
- last_name: text (nullable)
- role_id: bigint (foreign key to roles.id, nullable)
- created_at: timestamp (default: now())

user_groups:
- id: bigint (primary key)
- user_id: bigint (foreign key to users.id, on delete cascade)
- group_id: bigint (foreign key to groups.id, on delete cascade)
- unique (user_id, group_id)
"""
