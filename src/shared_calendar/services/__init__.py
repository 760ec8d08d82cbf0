"""Services exposing the calendar store to clients."""
