"""TOOLCHEST test suite.

Folder taxonomy
- unit/         : Isolated checks of a single combinator, adapter or helper.
- contract/     : Behavior every Clock implementation must share.
- e2e/          : The `toolchest` command driven through Click's CliRunner.

General guidance
- Drive time through ManualClock wherever a combinator accepts a clock.
- Tests that need real threads (debounce, timeout) use generous margins.
- Contract parametrizes implementations to ensure consistent behavior.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers: unit, contract, e2e (applied by directory), property
"""
