"""HTTP routers for the ReadySetHire API."""
