"""EC2 instance type catalog: compute capacity of RDS instance classes."""

from dataclasses import dataclass
from typing import Any

from rds_health_aws._sdk import call
from rds_health_protocols import CPU, BiB, Compute, GHz, MiB, Storage

DB_CLASS_PREFIX = "db."


@dataclass
class InstanceCatalog:
    """ComputeCatalog backed by EC2 DescribeInstanceTypes."""

    client: Any

    async def lookup(self, instance_type: str) -> Compute | None:
        """
        Describe an instance class such as "db.r5.large".

        Returns:
            Compute capacity, or None when EC2 does not know the type
        """
        name = instance_type.removeprefix(DB_CLASS_PREFIX)
        response = await call(
            "ec2", self.client.describe_instance_types, InstanceTypes=[name]
        )

        types = response.get("InstanceTypes", [])
        if len(types) != 1:
            return None
        return to_compute(types[0])


def to_compute(info: dict[str, Any]) -> Compute:
    compute = Compute()

    memory = info.get("MemoryInfo")
    if memory is not None:
        compute.memory = Storage(type="memory", size=BiB(memory.get("SizeInMiB", 0) * MiB))

    vcpu = info.get("VCpuInfo")
    if vcpu is not None:
        compute.cpu = CPU(cores=vcpu.get("DefaultVCpus", 0), clock=GHz(0.0))

    processor = info.get("ProcessorInfo")
    if processor is not None and compute.cpu is not None:
        compute.cpu.clock = GHz(processor.get("SustainedClockSpeedInGhz", 0.0))

    return compute
