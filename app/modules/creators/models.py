# Supabase table: ams_creator_profiles
# Supabase Storage bucket: aibook-media (public), avatars under avatars/
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, references auth.users.id)
- username: text (not null) - defaults to the owner's email
- full_name: text (nullable)
- title: text (nullable)
- languages: text[] (default: '{}')
- bio: text (nullable)
- experience: text (nullable)
- avatar_url: text (nullable) - public URL in the media bucket or S3
- tools_skills: text[] (default: '{}')
- solutions_for: text[] (default: '{}') - category titles from app/config/categories.py
- video_url: text (nullable) - YouTube or Loom link
- additional_info: text (nullable)
- approximate_pricing: text (nullable)
- contact_email: text (nullable)
- linkedin_url: text (nullable)
- booking_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A profile is listed under a category only when it has both full_name and title.
"""
