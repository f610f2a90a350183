from proton_usage.main import main

main()
