"""
The VIEW layer: Qt widgets and the PyVista viewport. Reads from the Session,
never writes to the model directly.
"""
