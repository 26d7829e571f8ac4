"""Resources bundled with the rendering engine."""
