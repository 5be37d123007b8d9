"""Resource extensions for the Canvas API.

Each module exposes one REST resource family as a typed set of async
operations. The operation classes take any
:class:`~canvas_api.request.RequestPort`, normally a built
:class:`~canvas_api.client.CanvasClient`.
"""
