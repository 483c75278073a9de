from tidylab._logging.mlflow import MLflowLogger
from tidylab._logging.noop import NoOpLogger
from tidylab._logging.wandb import WandbLogger

__all__ = [
    "MLflowLogger",
    "NoOpLogger",
    "WandbLogger",
]
