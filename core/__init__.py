"""
Bot core.

Contains:
- scoring.py: question and score types, scoring, result formatting
- catalog.py: YAML question catalogue (seed source)
- session.py: AssessmentSession, the start → questions → result flow
- machine.py: StateMachine dispatching updates to the stage views
- callback_protocol.py: callback_data format of the inline buttons
"""
