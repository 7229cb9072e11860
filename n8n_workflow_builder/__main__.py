from n8n_workflow_builder.server import main

if __name__ == "__main__":
    main()
