"""
                Voice Order Service

Turns spoken restaurant orders into structured order lines: speech-to-text
with a hybrid Mock/Real provider architecture, transcript item matching,
and draft order review.

Author: Khalil_Bannouri
Version: 3.0.0
License: MIT
"""

__version__ = "3.0.0"
__author__ = "Khalil_Bannouri"
