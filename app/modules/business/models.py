# Supabase table: ams_business_profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (unique, references auth.users.id, not null)
- company_email: text (not null) - the signed-in user's email
- company_website: text (not null) - must start with http:// or https://
- linkedin_url: text (nullable)
- verification_status: text (not null, default: 'pending') - values: pending, rejected, verified
- attempt_count: integer (not null, default: 0)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

verification_status is only ever written as 'pending' by this service.
'verified' / 'rejected' are set out-of-band by whoever reviews the
webhook payload.
"""
