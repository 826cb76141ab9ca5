"""
Views of the StateMachine, one per session stage.

- base.py: BaseState
- assessment/: start form, questions, result
- registry.py: register_all_states()
"""
