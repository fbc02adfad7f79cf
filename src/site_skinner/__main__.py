from site_skinner import main

main()
