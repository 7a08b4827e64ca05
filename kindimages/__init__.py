"""
kind-images - Local image inventory for kind clusters

Shows the images in the local docker store next to the images loaded
into a kind node, and loads or deletes images on request.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- runner: External command execution
- inventory: Docker and kind image listing
- actions: Load/delete orchestration and the loading guard
- view: Page rendering
- api: Shared data models
- config: Application configuration
"""

__version__ = "1.0.0"
