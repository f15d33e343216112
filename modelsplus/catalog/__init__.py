from modelsplus.catalog.records import (
    Model,
    ModelCost,
    ModelLimit,
    ModelModalities,
    Provider,
)

__all__ = ["Model", "ModelCost", "ModelLimit", "ModelModalities", "Provider"]
