"""HTTP interface: routers, session handling and error translation."""
