from .step_10_base_packages import BasePackagesStep
from .step_20_docker import DockerStep
from .step_30_nodejs import NodeJsStep
from .step_40_openjdk import OpenJdkStep
from .step_50_fastfetch import FastFetchStep
from .step_90_verify import VerifyStep

__all__ = [
    "BasePackagesStep",
    "DockerStep",
    "NodeJsStep",
    "OpenJdkStep",
    "FastFetchStep",
    "VerifyStep",
]
