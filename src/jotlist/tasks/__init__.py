"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Outcome, BatchReport, UNSET)
- errors.py: error taxonomy (parse / validation / storage)
- dates.py: due-date parsing and canonical formatting
- ids.py: flexible id-list parsing
- task_store.py: in-memory ordered collection with dirty tracking
- task_file.py: JSON file persistence (atomic write, backup, restore)
"""
