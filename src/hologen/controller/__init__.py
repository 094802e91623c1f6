"""
The CONTROLLER layer drives state transitions (synthesis runs, image decoding)
and turns geometry descriptors into renderable meshes.
"""
