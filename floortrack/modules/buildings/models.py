# Supabase table: buildings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

buildings:
- id: bigint (primary key)
- name: text (not null)
- created_at: timestamp (default: now())

Floors reference buildings with ON DELETE CASCADE, so deleting a building
removes its floors, their APs and the clients attached to them.
"""
