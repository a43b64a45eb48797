"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases.
They coordinate between entities, ports, and external systems.

This layer contains:
- MetadataService: metadata resolution with fill-missing persistence
- ThumbnailService: three-tier thumbnail cache-aside with single-flight generation
- CatalogService: listing, enrichment, series aggregation and search
- StreamingService: byte-range streaming proxy to the object store

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
