from contentseeker.cli import main

main()
