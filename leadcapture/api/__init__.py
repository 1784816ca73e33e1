"""
Remote collaborators of the submission workflow.

- confirmation: sends the confirmation email through a Supabase Edge Function
- leads: inserts lead rows into the Supabase `leads` table
"""

from .confirmation import ConfirmationSender, SupabaseConfirmationSender
from .leads import LeadRepository, SupabaseLeadRepository

__all__ = [
    "ConfirmationSender",
    "SupabaseConfirmationSender",
    "LeadRepository",
    "SupabaseLeadRepository",
]
