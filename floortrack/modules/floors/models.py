# Supabase table: floors
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

floors:
- id: bigint (primary key)
- name: text (not null)
- svg_map: text (not null) - raw SVG markup or a URL, stored as-is
- building_id: bigint (foreign key to buildings.id, not null, on delete cascade)
- created_at: timestamp (default: now())
"""
