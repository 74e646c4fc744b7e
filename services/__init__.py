"""
Adapters around the game engine: render sinks, video export and key bindings.
"""
