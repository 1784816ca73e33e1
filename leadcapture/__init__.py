"""
LeadCapture
===========

Lead-capture form core: collects a name, email and industry, sends a
confirmation email through a Supabase Edge Function and stores the lead in
the `leads` table.

Modules:
- guard: duplicate-submission guard (in-flight lock, replay set, cooldown)
- workflow: one end-to-end submission attempt plus form view state
- validation: field rules and email normalization
- api: Supabase confirmation sender and lead repository
- store: shared application state observed by other views
- cli: terminal front end
"""

__version__ = "0.3.0"
__author__ = "LeadCapture Team"
