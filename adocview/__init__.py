"""
adocview - AsciiDoc preview rendering

Renders AsciiDoc markup to HTML fragments for a live preview panel using a
single shared rendering engine, and turns whatever the engine prints while it
works into user-visible notifications.

Architecture:
- Rendering Context: engine lifecycle, output capture, render options, rendering
- Notifications Context: severity-tagged notifications and their delivery bus
"""

__version__ = "0.1.0"
