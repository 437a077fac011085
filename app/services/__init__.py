"""
                        Services Module

Contains the business logic behind the voice ordering API.

Services:
    - matching: Transcript-to-order item matching
    - transcription: Speech-to-text (Mock and ElevenLabs implementations)
    - ordering: Draft orders built from matched items
"""
