# Supabase table: roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Rows are seeded from floortrack/config/roles_config.py

"""
Expected Supabase table structure:

roles:
- id: bigint (primary key)
- name: text (not null, unique) - Owner, Organization Admin, Site Admin, User, Pending User
- description: text (nullable)
- created_at: timestamp (default: now())
"""
