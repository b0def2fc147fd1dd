"""Git gateway.

Import from submodules:
- abc: Git
- real: RealGit
- fake: FakeGit
- printing: PrintingGit
- types: result values shared by all implementations
"""
