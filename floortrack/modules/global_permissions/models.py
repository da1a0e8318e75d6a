# Supabase table: global_permissions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

global_permissions:
- id: bigint (primary key)
- group_id: bigint (foreign key to groups.id, not null, on delete cascade)
- building_id: bigint (foreign key to buildings.id, not null, on delete cascade)
- floor_id: bigint (foreign key to floors.id, not null, on delete cascade)
- created_at: timestamp (default: now())

One row grants one group access to one building and one floor of it.
Organization Admins read the floor_id, Site Admins read the building_id
(see floortrack.core.rbac).
"""
