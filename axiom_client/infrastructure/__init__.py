"""Infrastructure layer - concrete gateways talking to the Axiom web API."""
