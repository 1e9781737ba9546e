"""Application services for prtag.

Services implement the release logic, coordinating between the domain
layer (core/) and infrastructure (git/, platform/).
"""
