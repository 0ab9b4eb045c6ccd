# Supabase table: ams_pending_requests
# Account deletion also clears rows owned by the user in
# business_posts, ams_creator_profiles and ams_business_profiles
# (see those modules' models.py).

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id, not null)
- created_at: timestamp (default: now())

The auth.users row itself is not deleted here; the user is signed out.
"""
