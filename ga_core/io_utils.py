"""
I/O utilities for the GA core.

Handles CSV export of generations, the generation history log, run folder
management and YAML metadata sidecars.
"""

import csv
from dataclasses import fields
from pathlib import Path
from typing import Union

import yaml

from .data_models import GenerationRecord
from .population import GenerationView

HISTORY_FIELDS = [f.name for f in fields(GenerationRecord)]


def create_run_folder(root: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Create the output folder of a run.

    Args:
        root: Output directory
        overwrite: If True, reuse an existing directory

    Returns:
        Path to the folder

    Raises:
        FileExistsError: If folder already exists and overwrite=False
    """
    root = Path(root)

    if root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    root.mkdir(parents=True, exist_ok=overwrite)
    return root


def save_generation_to_csv(
    generation: GenerationView,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save a generation to CSV file, one row per individual.

    CSV format:
        rank,fitness,chosen,elite,<genotype fields...>
        0,-0.9899,False,False,0.1421
        ...

    Rank follows the window order, so a sorted generation ends with its
    best individual.

    Args:
        generation: Generation to save
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    genotype_fields = list(generation[0].local_data.genotype()) if len(generation) else []

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['rank', 'fitness', 'chosen', 'elite'] + genotype_fields)

        for rank, chromosome in enumerate(generation):
            local_data = chromosome.local_data
            genotype = local_data.genotype()
            writer.writerow(
                [rank, chromosome.fitness_value, local_data.chosen, local_data.elite]
                + [genotype[name] for name in genotype_fields]
            )

    return output_path


def save_history_log(
    records: list[GenerationRecord],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save generation records to CSV file.

    Args:
        records: List of GenerationRecord objects
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved history log

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"History log already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_FIELDS)
        writer.writeheader()

        for record in records:
            writer.writerow(record.to_dict())

    return output_path


def load_history_log(csv_path: Union[str, Path]) -> list[GenerationRecord]:
    """
    Load generation records from a history log.

    Args:
        csv_path: Path to history CSV

    Returns:
        List of GenerationRecord objects, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns are missing
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"History log not found: {csv_path}")

    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        required = {'generation', 'best_fitness', 'mean_fitness', 'worst_fitness', 'std_fitness'}
        if not required.issubset(set(reader.fieldnames or [])):
            raise ValueError(f"Invalid history log format in {csv_path}. Expected columns: {sorted(required)}")

        return [GenerationRecord.from_dict(row) for row in reader]


def save_metadata(
    metadata: dict,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save metadata to YAML sidecar file.

    Args:
        metadata: Metadata dictionary
        output_path: Path for output YAML
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved metadata file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Metadata file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        yaml.safe_dump(metadata, f, default_flow_style=False, sort_keys=False)

    return output_path
