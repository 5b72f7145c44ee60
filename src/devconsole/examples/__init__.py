"""
Example command plugins. Load one with ``devconsole --plugin devconsole.examples.hello_world``.
"""
