"""NiceGUI interface - session sidebar, transcript, and PDF upload.

Responsibilities:
    - Chat controller tracking the view state and sequencing client calls
    - Session list with create, select, and delete
    - Transcript display with markdown answers
    - PDF upload and dark/light theme toggle

The page renders; the controller decides. The controller has no NiceGUI
dependency and is tested on its own.
"""
