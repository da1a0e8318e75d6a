# Supabase table: user_devices
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_devices:
- id: bigint (primary key)
- user_id: bigint (foreign key to users.id, on delete cascade)
- name: text (not null)
- mac: text (not null, unique)
"""
