"""Wire-level pieces of the STOMP protocol, independent of any client state."""
