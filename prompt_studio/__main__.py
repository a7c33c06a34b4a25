from prompt_studio.api.cli import main

main()
