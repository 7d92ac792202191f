"""Application layer - DTOs and use cases orchestrating the domain and gateways."""
