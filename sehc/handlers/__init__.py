"""Request handlers: validate, persist through the injected session, shape a Result."""
