"""Pure Python CSG ray tracer with a Monte Carlo path tracer.

This package renders scenes built from geometric primitives, combined with
constructive solid geometry, into high dynamic range images.

Subpackages:
    core: Vectors, transforms, rays, colors, the PCG generator, HDR images,
        renderers and the image tracer
    geometry: Shape primitives and CSG combinators
    materials: Pigments, BRDFs and materials
    scene: World container and demo scenes
    camera: Orthogonal and perspective cameras
    preview: Tone mapping, preview display and LDR export
"""

__version__ = "0.1.0"
