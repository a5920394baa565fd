"""Test package for the Executive Decision Maker.

The engine tests drive ``DecisionMaker`` with a fake clock and scripted or
seeded randomness; the frame tests render into rich segment lines and the
smoke tests run the event loop against an in-memory screen, so nothing here
needs a real terminal. To run these tests, execute ``pytest`` from the
project root.
"""
