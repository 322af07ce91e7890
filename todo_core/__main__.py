"""Run the todo-core server: python -m todo_core"""

from .main import main

main()
