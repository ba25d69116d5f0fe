from patch_facts.cli.main import main

if __name__ == "__main__":
    main()
