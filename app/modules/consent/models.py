# Supabase table: cookie_consent_logs
# Append-only audit trail; rows are never updated or deleted by the API.

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (nullable, references auth.users.id) - signed-in visitors
- session_id: text (nullable) - anonymous visitors, generated by the browser
- essential: boolean (not null, always true)
- analytics: boolean (not null, default: false)
- marketing: boolean (not null, default: false)
- consent_version: text (not null)
- user_agent: text (nullable)
- created_at: timestamp (default: now())

Exactly one of user_id / session_id identifies the visitor.
"""
