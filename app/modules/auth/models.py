# Supabase Auth
# This module uses Supabase's built-in passwordless authentication
# No custom tables are required - Supabase Auth handles:
# - Account creation on the first magic-link request (auth.users table)
# - Magic-link (OTP) email delivery and session management
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.sign_in_with_otp() - Send a magic link, creating the user if needed
- auth.get_user() - Get current user from JWT token
- auth.reset_password_for_email() - Send a recovery link
- auth.sign_out() - Logout users

User metadata stored on auth.users.raw_user_meta_data:
- user_type: 'creator' | 'business'
- terms_accepted_at: ISO timestamp, only for accounts created through the terms step

Existence check RPC (SECURITY DEFINER function in the public schema):
- check_email_exists(email_to_check text) returns boolean
"""
