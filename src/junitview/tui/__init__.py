"""Terminal front end: key bindings, rich rendering and the event loop."""
