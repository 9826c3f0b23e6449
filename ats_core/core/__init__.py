"""
Core business logic modules for ats-core.

Submodules:
- workflow: Application status state machine and SLA tracking
- matching: Candidate-job matching engine
- query: Read operations and reports
"""
