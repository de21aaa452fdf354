"""Pydantic request/response models; wire names are camelCase (see schemas.common.CamelModel)."""
