# Supabase table: clients
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

clients:
- id: bigint (primary key)
- mac: text (unique, not null) - client MAC address as reported by the AP
- ap_id: bigint (foreign key to aps.id, not null, on delete cascade)
- created_at: timestamp (default: now())
"""
