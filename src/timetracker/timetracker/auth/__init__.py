"""Thin wrapper over the hosted Supabase auth and `profiles` table."""
