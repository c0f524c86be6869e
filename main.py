"""Run the Specture MCP server over stdio."""

from specture.server import main

if __name__ == "__main__":
    main()
