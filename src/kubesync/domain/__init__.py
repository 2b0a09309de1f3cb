"""Core sync domain: records, policies, reconciliation and orchestration."""
