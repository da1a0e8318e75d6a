# Supabase tables: groups, user_groups
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

groups:
- id: bigint (primary key)
- name: text (not null, unique)
- created_at: timestamp (default: now())

user_groups:
- id: bigint (primary key)
- user_id: bigint (foreign key to users.id, not null)
- group_id: bigint (foreign key to groups.id, not null)
- created_at: timestamp (default: now())
- unique constraint on (user_id, group_id)
"""
