# Supabase table: business_posts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (references auth.users.id, not null) - owning business
- project_title: text (not null)
- company_name: text (not null)
- automation_needs: text (not null)
- technical_stack: text (nullable)
- budget: text (nullable)
- timeline: text (nullable)
- languages: text (nullable)
- additional_info: text (nullable)
- contact_email: text (not null)
- status: text (not null, default: 'active') - values: active, archived, expired
- created_at: timestamp (default: now())
- expires_at: timestamp (not null) - created_at + POST_TTL_DAYS

Public listings always filter on expires_at > now(), so a stale 'active'
status on an expired row is never visible to other users.
"""
