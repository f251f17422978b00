"""
Downloadable sample files.

The samples are fixed documents, written by hand to illustrate each
entity's format. They are not generated from the field rules; the test
suite keeps them valid against those rules.
"""

from pathlib import Path

from workload_import.schemas.entities import EntityKind
from workload_import.utils.logging import get_logger

log = get_logger(__name__)

SAMPLE_CSV: dict[EntityKind, str] = {
    EntityKind.MODULES: (
        "code,title,credits,level,moduleLeader,defaultTeachingHours,defaultMarkingHours\n"
        "CS101,Introduction to Computer Science,20,4,Dr. Smith,40,10\n"
        "CS102,Programming Fundamentals,20,4,Dr. Johnson,45,15"
    ),
    EntityKind.MODULE_ITERATIONS: (
        "moduleCode,title,semester,cohortId,teachingStartDate,teachingHours,"
        "markingHours,assignedStatus,notes\n"
        "CS101,Introduction to Computer Science,1,2024-25,2024-09-23,40,10,"
        "unassigned,First semester offering\n"
        "CS102,Programming Fundamentals,1,2024-25,2024-09-23,45,15,"
        "unassigned,Core programming module"
    ),
    EntityKind.LECTURERS: (
        "fullName,team,specialism,contract,email,capacity,maxTeachingHours,role,status,fte\n"
        "Dr. John Smith,Adult,Clinical Practice,Full-time,john.smith@university.edu,"
        "40,35,Senior Lecturer,available,1.0\n"
        "Dr. Sarah Johnson,Children,Paediatric Nursing,Part-time,"
        "sarah.johnson@university.edu,20,18,Lecturer,available,0.5"
    ),
}


def sample_filename(kind: EntityKind) -> str:
    """Default download name for an entity's sample, e.g. ``modules-sample.csv``."""
    return f"{kind.value}-sample.csv"


def write_sample(kind: EntityKind, output: Path) -> Path:
    """
    Write the sample document for an entity.

    Args:
        kind: Entity kind.
        output: Target file, or a directory to place the default filename in.

    Returns:
        Path of the written file.
    """
    path = output / sample_filename(kind) if output.is_dir() else output
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SAMPLE_CSV[kind], encoding="utf-8")
    log.info("Wrote sample file", entity=kind.value, path=str(path))
    return path
