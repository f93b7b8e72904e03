"""OpenGL rendering: shaders, the cube mesh, instance buffers, textures and the instanced renderer."""