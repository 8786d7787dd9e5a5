from nixieclock.cli import main

main()
