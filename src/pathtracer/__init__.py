"""CPU Monte Carlo path tracer for sphere scenes.

This package renders scenes made of spheres with unidirectional path tracing,
with support for:
- Diffuse, metal and glass materials
- A thin-lens camera with depth of field
- A sky gradient as the only light source
- Multi-threaded tile rendering with progressive PNG output

Subpackages:
    core: Vectors, rays, the radiance integrator and the tile scheduler
    geometry: The hittable contract and the sphere primitive
    materials: Surface scattering models
    scene: Scene container, serialization and the random spheres demo
    camera: Thin-lens camera with ray generation
    preview: PNG output

Configuration lives in ``pathtracer.config``.
"""

__version__ = "0.1.0"
