"""
# Database Package

The persistence core of the Event Blog API, built on **Motor** (async MongoDB driver).

## Core Components

- **`manager`**: `DatabaseManager`, the connection supervisor. Connects once per process,
  on first use, and memoizes the outcome.
- **`provisioner`**: `CollectionProvisioner`, which makes sure a collection and its unique
  indexes exist before handing out a handle.
- **`consistency`**: `ConsistencyCoordinator`, the ordered multi-step cascading deletes.
- **`errors`**: The error taxonomy every component raises.
- **`documents`**: Stored document to model conversion; a mismatch is a `StorageError`.

## Wiring

Components receive their collaborators explicitly; there is no module-level manager:

```python
manager = DatabaseManager(settings)
provisioner = CollectionProvisioner(manager)
coordinator = ConsistencyCoordinator(provisioner)

result = await coordinator.delete_stock(stock_id)
```
"""

from event_blog.database.consistency import ConsistencyCoordinator
from event_blog.database.manager import DatabaseManager
from event_blog.database.provisioner import CollectionProvisioner

__all__ = ["CollectionProvisioner", "ConsistencyCoordinator", "DatabaseManager"]
