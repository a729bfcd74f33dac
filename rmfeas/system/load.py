"""Read task systems from JSON documents.

A system is either a list of task objects or an object with a "tasks" list
and an optional "name":

    [{"period": 2, "wcet": 1}, {"period": 10, "wcet": 1}]
    {"name": "Ex-0", "tasks": [{"period": 2, "wcet": 1}]}

Numbers may be given as JSON numbers or as strings such as "5/2" or "2.5".
"""

import json
import pathlib
from typing import List, Optional, Tuple

from rmfeas.system.task import InvalidTaskSet, Task

EXAMPLES = pathlib.Path(__file__).resolve().parent.parent / 'data' / 'examples.json'


def task_from_obj(obj, index: int) -> Task:
    if not isinstance(obj, dict):
        raise InvalidTaskSet(f'task {index} must be an object, got {obj!r}')
    missing = [key for key in ('period', 'wcet') if key not in obj]
    if missing:
        raise InvalidTaskSet(
            f'task {index} is missing {", ".join(missing)}')
    return Task(wcet=obj['wcet'], period=obj['period'])


def system_from_obj(obj) -> Tuple[Optional[str], List[Task]]:
    """Convert one decoded JSON system into (name, tasks)."""
    name = None
    if isinstance(obj, dict):
        if 'tasks' not in obj:
            label = f" {obj['name']!r}" if 'name' in obj else ''
            raise InvalidTaskSet(
                f"task system{label} needs a 'tasks' key")
        name = obj.get('name')
        obj = obj['tasks']
    if not isinstance(obj, list):
        raise InvalidTaskSet(f'expected a list of tasks, got {obj!r}')
    return name, [task_from_obj(item, i) for i, item in enumerate(obj)]


def load_systems(path) -> List[Tuple[Optional[str], List[Task]]]:
    """Load one system, or a list of systems, from a JSON file.

    A file holding a list in which some item carries a "tasks" key is read as
    a list of systems; anything else is read as a single system.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except UnicodeDecodeError as exc:
        raise InvalidTaskSet(f'{path}: not valid UTF-8 JSON') from exc
    if isinstance(raw, list) and any(
            isinstance(item, dict) and 'tasks' in item for item in raw):
        return [system_from_obj(item) for item in raw]
    return [system_from_obj(raw)]


def load_examples() -> List[Tuple[Optional[str], List[Task]]]:
    """The example systems shipped with the package."""
    return load_systems(EXAMPLES)
