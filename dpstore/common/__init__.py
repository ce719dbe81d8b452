"""
Common modules which are used throughout the service.

- [Config][dpstore.common.config] - Reading of the YAML configuration directory.
- [Datapoint][dpstore.common.datapoint] - Datapoint record model, its defaults
  and its public representation.
"""
