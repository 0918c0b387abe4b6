"""OAuth state / login flow use cases."""
