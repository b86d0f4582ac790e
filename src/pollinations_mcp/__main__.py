from pollinations_mcp.cli import main

main()
