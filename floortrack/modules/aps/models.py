# Supabase table: aps
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

aps:
- id: bigint (primary key)
- name: text (not null)
- cx: double precision (not null) - marker x position on the floor map
- cy: double precision (not null) - marker y position on the floor map
- floor_id: bigint (foreign key to floors.id, not null, on delete cascade)
- created_at: timestamp (default: now())
"""
