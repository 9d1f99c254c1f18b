from drupal_mcp.main import main

main()
